"""Utility functions and classes shared across the package.

- `logger`: package-level logger
- `factory`: tools to instantiate classes from configuration blocks
- `globals`: physics constants (PDG codes, process codes) and default names
- `stopwatch`: simple wall/CPU timers used to profile tasks
"""
