"""stylegraph: rebuild captured HTML style trees as design-tool scene graphs."""

__version__ = "0.1.0"
