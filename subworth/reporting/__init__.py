"""
subworth.reporting — terminal formatting for CLI output.

Modules:
  formatters — ASCII table formatters for verdicts, savings, catalog
               listings and TMDB results.

File output (JSON / CSV reports) lives in ``subworth.recommendations.reporter``.
"""
