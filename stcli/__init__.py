"""stcli: an interactive command line client for the SpaceTraders API."""

__version__ = "0.1.0"
