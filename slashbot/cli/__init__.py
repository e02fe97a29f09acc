"""Console entry points -- ``slashbot-run`` and ``slashbot-register``."""
