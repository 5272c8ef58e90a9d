"""
Benchmark suite for bencodec decoding and JSON rendering.

Uses JSON libraries on equivalent documents as reference points:
- Python standard library json
- orjson (Rust-accelerated)
- ujson (ultra-fast JSON)

Measures speed and peak memory across document shapes.
"""
