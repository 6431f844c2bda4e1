"""Pipeline orchestration for matrix-notify."""

from .notify import NotifyResult, RunState, run_notify  # noqa: F401

__all__ = ["NotifyResult", "RunState", "run_notify"]
