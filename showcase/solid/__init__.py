"""One module per SOLID principle, each a small self-contained example."""
