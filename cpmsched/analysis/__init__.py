"""Schedule analysis built on top of the CPM engine."""

from .critical_path import (
    CriticalPathResult,
    analyze_critical_path,
    find_critical_chains,
    print_critical_path_report,
    summarize_critical_path,
    trace_critical_chain,
)

__all__ = [
    'CriticalPathResult',
    'analyze_critical_path',
    'find_critical_chains',
    'print_critical_path_report',
    'summarize_critical_path',
    'trace_critical_chain',
]
