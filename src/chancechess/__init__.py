"""Chess rules engine with classic, coin-toss and dice turn variants."""

__version__ = "0.1.0"
