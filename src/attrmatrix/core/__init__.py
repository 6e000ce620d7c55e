"""
attrmatrix core — the tabular data model and its consistency rules.

Modules
-------
errors         Typed error hierarchy (InvalidInput, NotFound, DuplicateName, ...)
logging        structlog configuration and ``get_logger``
settings       ``AttrMatrixSettings`` (pydantic-settings)
schema         Explicit SQLAlchemy Core table definitions
database       Engine factory and request-scoped connections
models         Frozen dataclasses for entities and views
spell          ``derive_spell`` — pinyin key for row names
repository     ``BaseRepository`` over a SQLAlchemy connection
matrix         ``AttributeMatrix`` — cells, density, table view
criteria       ``CriteriaRegistry`` — columns
formulas       ``FormulaRegistry`` — rows
axis_settings  ``AxisSettingRegistry`` — axis bindings
transfer       ``TableTransfer`` — export / import reconciliation
workspace      ``MatrixWorkspace`` — all of the above on one connection
"""

from attrmatrix.core.errors import (
    DuplicateNameError,
    InternalFailureError,
    InvalidInputError,
    MatrixError,
    NotFoundError,
    TransientStoreError,
)
from attrmatrix.core.spell import derive_spell
from attrmatrix.core.workspace import MatrixWorkspace

__all__ = [
    "MatrixError",
    "InvalidInputError",
    "NotFoundError",
    "DuplicateNameError",
    "TransientStoreError",
    "InternalFailureError",
    "MatrixWorkspace",
    "derive_spell",
]
