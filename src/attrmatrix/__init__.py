"""attrmatrix — multi-axis attribute matrix editor.

A table of named formulas (rows) and criteria (columns) with an integer
value at every intersection, plus axis settings binding four criteria to
the ends of two chart axes.  Served over an authenticated FastAPI app with
bulk export/import.
"""

__version__ = "1.0.0"
