"""XOR cipher cryptanalysis: frequency scoring, key-length estimation and key recovery."""

__version__ = "0.1.0"
