"""Delivery admin API package.

Keeps ``delivery_admin`` a regular package so the import never resolves to an
unrelated namespace package found on ``sys.path``.
"""
