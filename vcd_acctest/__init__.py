"""vcd-acctest - bootstrap layer for vCloud Director provider acceptance tests.

Loads ``vcd_test_config.json``, exports the provider credentials into the
environment before any test runs, and renders Terraform templates into
``test-artifacts/`` so failed runs can be reproduced by hand.
"""

try:
    from importlib.metadata import version

    __version__ = version("vcd-acctest")
except Exception:
    __version__ = "0.0.0.dev0"

__all__ = ["__version__"]
