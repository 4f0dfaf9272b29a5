"""
MiniBTree CLI
=============
Rendering helpers for the demo driver (main.py).
"""
