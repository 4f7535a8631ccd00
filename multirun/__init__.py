"""multirun: plan parallel run units from a multi-suite browser test config.

The main entrypoint is :func:`multirun.suites.collection.prepare_suites`;
callers that also want worker commands or a manifest should use
:class:`multirun.planner.MultiRunPlanner`.
"""

__version__ = "0.1.0"
