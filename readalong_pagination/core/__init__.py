"""Core pagination modules.

WHY: The core package is the pure heart of the engine: the IR
dataclasses, the break detectors, page assembly, the long-page splitter
and the orchestrator that sequences them. Adapters and formatters sit
around it and may change freely; the core may not reach out to them.

HOW: ir.py defines the data structures, protected.py and punctuation.py
find break points, pages.py and splitter.py build and re-split pages,
paginator.py runs the passes in order.

RULES:
- No I/O and no environment access anywhere in core
- Every function returns new objects; inputs are never mutated
"""
