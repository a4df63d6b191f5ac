"""Employee Directory package.

Feature modules (employees, security, storage, ...) sit behind a thin Flask
controller layer; services talk to repositories through Protocols so the
record store can be swapped without touching the flows.
"""
