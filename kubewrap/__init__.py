"""
Kubewrap - kubectl command wrapper for job orchestration

Builds kubectl command lines for a small set of cluster operations, runs them
through an injected process executor and interprets the output.

Architecture:
- Each module is self-contained with clear interfaces
- The process executor is injected and replaceable
- No caching, no retries: callers own polling policy

Modules:
- executor: Process execution boundary (subprocess)
- kubectl: Command building and job status interpretation
"""

__version__ = "1.0.0"
