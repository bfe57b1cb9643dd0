"""Ballot Relay — HTTP relay for the MyToken / TokenizedBallot contracts."""

__version__ = "0.1.0"
