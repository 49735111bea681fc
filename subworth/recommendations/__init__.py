"""
Recommendation engine: converts a month's platform catalogs and a user's
interests into ranked buy/continue/pause/skip verdicts with savings.

Modules
-------
scorer   : score_platform() + per-component calculators + determine_verdict()
           + build_reasoning() — pure functions, no I/O.
ranker   : score_all_platforms() + calculate_total_savings() +
           group_by_verdict() + filter_subscribed().
reporter : write_verdict_csv() + write_verdict_json() — file output.
"""
