from vcd_acctest.cli import main

main()
