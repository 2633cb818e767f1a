"""Transport layer: serial connection and exact-count reads."""
