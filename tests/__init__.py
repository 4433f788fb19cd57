"""Test package, importable as `tests` for shared helpers."""
