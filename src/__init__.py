"""
Stock Checker: verificação de disponibilidade de produtos em supermercados online.
"""

__version__ = "0.1.0"
