"""Attribution names for rendered artifacts.

An artifact is named after the code that asked for it.  Two mechanisms
exist, tried in this order by the renderer:

1. a name bound with :func:`attribution`.  The pytest plugin binds the
   running test's ``<module leaf>.<qualname>`` and marks the test function
   as the binding's owner, so renders from helpers get the helper's name
   appended (``test_org.test_basic._step1``)
2. :func:`resolve_caller_name`, which walks the call stack
"""

from __future__ import annotations

import sys
from contextlib import contextmanager
from contextvars import ContextVar
from types import FrameType
from typing import Iterator, NamedTuple, Optional

#: Frames from modules under this package are never reported as callers.
INTERNAL_PACKAGE = "vcd_acctest.render"


class Binding(NamedTuple):
    """A name bound by :func:`attribution`.

    *owner* is the ``module:qualname`` of the function the name belongs to,
    or ``""`` when the name applies to every render in the block.
    """

    name: str
    owner: str = ""

    def name_for(self, caller: str) -> str:
        """Attribution name for a render made by *caller* (``module:qualname``)."""
        if not self.owner or not caller or caller == self.owner:
            return self.name
        return f"{self.name}.{caller.partition(':')[2] or caller}"


_current: ContextVar[Optional[Binding]] = ContextVar("vcd_acctest_attribution", default=None)


# ── explicit attribution ─────────────────────────────────────────────


@contextmanager
def attribution(name: str, owner: str = "") -> Iterator[str]:
    """Bind *name* as the attribution name for renders inside the block.

    Without *owner* every render in the block gets *name*.  With an owner,
    only renders made directly by that function do; renders from other
    functions get ``<name>.<their qualname>``.

    Nested blocks shadow the outer name and restore it on exit.
    """
    token = _current.set(Binding(name, owner))
    try:
        yield name
    finally:
        _current.reset(token)


def current_binding() -> Optional[Binding]:
    """Return the innermost :func:`attribution` binding, or ``None``."""
    return _current.get()


def current_attribution() -> str:
    """Return the name bound by the innermost :func:`attribution`, or ``""``."""
    binding = _current.get()
    return binding.name if binding is not None else ""


# ── stack walking ────────────────────────────────────────────────────


def _is_internal(frame: FrameType) -> bool:
    module = frame.f_globals.get("__name__", "")
    return module == INTERNAL_PACKAGE or module.startswith(INTERNAL_PACKAGE + ".")


def _qualified_name(frame: FrameType) -> str:
    code = frame.f_code
    qualname = getattr(code, "co_qualname", code.co_name)
    if not qualname or qualname.startswith("<module"):
        return ""
    module = frame.f_globals.get("__name__", "")
    if not module:
        return qualname
    return f"{module}:{qualname}"


def resolve_caller_name(skip_frames: int = 2) -> str:
    """Return ``"<module>:<qualname>"`` of a function up the call stack.

    Frame 0 is this function, frame 1 its caller; the default of 2 names
    whoever called the function that called the resolver.  Frames that
    belong to :data:`INTERNAL_PACKAGE` are skipped on top of that.

    Returns ``""`` when the stack is not deep enough or the frame is
    module-level code rather than a function.
    """
    try:
        frame: Optional[FrameType] = sys._getframe(skip_frames)
    except ValueError:
        return ""
    while frame is not None and _is_internal(frame):
        frame = frame.f_back
    if frame is None:
        return ""
    return _qualified_name(frame)


def short_caller_name(name: str) -> str:
    """Reduce a qualified caller name to ``<module leaf>.<qualname>``.

    >>> short_caller_name("tests.acc.test_org:TestOrg.test_create")
    'test_org.TestOrg.test_create'
    """
    module, sep, qualname = name.partition(":")
    if not sep:
        return name
    leaf = module.rsplit(".", 1)[-1]
    return f"{leaf}.{qualname}" if leaf else qualname
