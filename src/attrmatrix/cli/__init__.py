"""attrmatrix command-line interface (Typer + Rich)."""
