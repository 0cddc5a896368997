"""Domain Operations — one module per resource.

Invariants:
    - Operations raise typed errors and return plain data; they never build HTTP responses
    - Persistence is reached only through the TableStore protocol
"""
