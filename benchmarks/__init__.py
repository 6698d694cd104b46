"""
Benchmark suite for cypherjson encoding and decoding performance.

Compares cypherjson against standard JSON libraries including:
- Python standard library json
- orjson (C-optimized)
- ujson (ultra-fast JSON)

Measures speed and memory usage on settings-shaped documents.
"""
