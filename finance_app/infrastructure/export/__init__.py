"""
Export pipeline infrastructure.
Encoders turn document trees into bytes; delivery mechanisms ship them.
"""
