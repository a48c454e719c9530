"""Mirror hierarchical test plans as legacy class/method trees."""

__version__ = "0.1.0"
