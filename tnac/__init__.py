"""Value model, diagnostics, IR control-flow graph and compiler support structures for a small calculator language."""

__version__ = "0.1.0"