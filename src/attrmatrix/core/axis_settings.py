"""Axis setting registry — named bindings of four criteria to chart axis ends.

A setting stores resolved criterion *ids*, so the binding survives any
later change to a criterion's name.  References are validated when a
setting is written only; deleting a criterion afterwards is allowed and
leaves that end dangling (rendered as ``None`` by :meth:`list`).
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import delete, select, update

from attrmatrix.core.criteria import CriteriaRegistry
from attrmatrix.core.errors import DuplicateNameError, InvalidInputError, NotFoundError
from attrmatrix.core.logging import get_logger
from attrmatrix.core.models import AXIS_ENDS, AxisSetting, AxisSettingView, Criterion
from attrmatrix.core.repository import BaseRepository
from attrmatrix.core.schema import axis_setting_table, criteria_table

logger = get_logger(__name__)

_END_COLUMNS = {
    "xNegative": "x_negative_criteria_id",
    "xPositive": "x_positive_criteria_id",
    "yNegative": "y_negative_criteria_id",
    "yPositive": "y_positive_criteria_id",
}


class AxisSettingRegistry(BaseRepository):
    """CRUD and validation for axis settings."""

    def __init__(self, conn: Any, criteria: CriteriaRegistry | None = None) -> None:
        super().__init__(conn)
        self.criteria = criteria or CriteriaRegistry(conn)

    # -- Reads -------------------------------------------------------------

    def find(self, setting_id: int) -> AxisSetting | None:
        row = self.query_one(
            select(axis_setting_table).where(axis_setting_table.c.id == setting_id)
        )
        return _setting(row) if row else None

    def get(self, setting_id: int) -> AxisSettingView:
        setting = self.find(setting_id)
        if setting is None:
            raise NotFoundError("axis_setting", setting_id)
        return self._view(setting, self._criteria_by_id())

    def list(self) -> list[AxisSettingView]:
        """Every setting with its ends resolved to current criteria."""
        by_id = self._criteria_by_id()
        rows = self.query(select(axis_setting_table).order_by(axis_setting_table.c.id))
        return [self._view(_setting(r), by_id) for r in rows]

    # -- Writes ------------------------------------------------------------

    def create(
        self,
        name: Any,
        x_negative: Any,
        x_positive: Any,
        y_negative: Any,
        y_positive: Any,
    ) -> AxisSettingView:
        """Validate and store a new setting.

        Raises:
            InvalidInputError: Any of the five fields is absent.
            DuplicateNameError: A setting named *name* exists.
            NotFoundError: Any criterion name does not resolve.
        """
        name, ends = _validate_fields(name, x_negative, x_positive, y_negative, y_positive)
        if self._by_name(name) is not None:
            raise DuplicateNameError("axis_setting", name)
        resolved = self._resolve_ends(ends)

        setting_id = self.insert(
            axis_setting_table,
            {"name": name, **{_END_COLUMNS[end]: c.id for end, c in resolved.items()}},
        )
        logger.info("axis_setting_created", id=setting_id, name=name)
        return AxisSettingView(id=setting_id, name=name, axes=dict(resolved))

    def update(
        self,
        setting_id: int,
        name: Any,
        x_negative: Any,
        x_positive: Any,
        y_negative: Any,
        y_positive: Any,
    ) -> AxisSettingView:
        """Re-validate and overwrite an existing setting.

        Raises:
            InvalidInputError: Any of the five fields is absent.
            NotFoundError: The setting id or a criterion name does not resolve.
            DuplicateNameError: *name* belongs to another setting.
        """
        name, ends = _validate_fields(name, x_negative, x_positive, y_negative, y_positive)
        resolved = self._resolve_ends(ends)
        if self.find(setting_id) is None:
            raise NotFoundError("axis_setting", setting_id)
        other = self._by_name(name)
        if other is not None and other.id != setting_id:
            raise DuplicateNameError("axis_setting", name)

        self.execute(
            update(axis_setting_table)
            .where(axis_setting_table.c.id == setting_id)
            .values(name=name, **{_END_COLUMNS[end]: c.id for end, c in resolved.items()})
        )
        logger.info("axis_setting_updated", id=setting_id, name=name)
        return AxisSettingView(id=setting_id, name=name, axes=dict(resolved))

    def delete(self, setting_id: int) -> AxisSetting:
        setting = self.find(setting_id)
        if setting is None:
            raise NotFoundError("axis_setting", setting_id)
        self.execute(delete(axis_setting_table).where(axis_setting_table.c.id == setting_id))
        logger.info("axis_setting_deleted", id=setting_id, name=setting.name)
        return setting

    # -- Internal ----------------------------------------------------------

    def _by_name(self, name: str) -> AxisSetting | None:
        row = self.query_one(
            select(axis_setting_table).where(axis_setting_table.c.name == name)
        )
        return _setting(row) if row else None

    def _resolve_ends(self, ends: dict[str, str]) -> dict[str, Criterion]:
        resolved: dict[str, Criterion] = {}
        missing: list[str] = []
        for end, criterion_name in ends.items():
            criterion = self.criteria.get(criterion_name)
            if criterion is None:
                missing.append(criterion_name)
            else:
                resolved[end] = criterion
        if missing:
            raise NotFoundError(
                "column",
                ", ".join(missing),
                message=f"One or more criteria not found: {', '.join(missing)}",
            )
        return resolved

    def _criteria_by_id(self) -> dict[int, Criterion]:
        rows = self.query(select(criteria_table))
        return {r["id"]: Criterion(id=r["id"], name=r["name"]) for r in rows}

    @staticmethod
    def _view(setting: AxisSetting, by_id: dict[int, Criterion]) -> AxisSettingView:
        return AxisSettingView(
            id=setting.id,
            name=setting.name,
            axes={end: by_id.get(cid) for end, cid in setting.criterion_ids().items()},
        )


def _validate_fields(
    name: Any, x_negative: Any, x_positive: Any, y_negative: Any, y_positive: Any
) -> tuple[str, dict[str, str]]:
    values = dict(zip(AXIS_ENDS, (x_negative, x_positive, y_negative, y_positive)))
    absent = [
        field
        for field, value in (("name", name), *values.items())
        if not isinstance(value, str) or not value.strip()
    ]
    if absent:
        raise InvalidInputError(
            f"All axes are required (missing: {', '.join(absent)})",
            field=absent[0],
        )
    return name.strip(), {end: v.strip() for end, v in values.items()}


def _setting(row: dict[str, Any]) -> AxisSetting:
    return AxisSetting(
        id=row["id"],
        name=row["name"],
        x_negative_id=row["x_negative_criteria_id"],
        x_positive_id=row["x_positive_criteria_id"],
        y_negative_id=row["y_negative_criteria_id"],
        y_positive_id=row["y_positive_criteria_id"],
    )


__all__ = ["AxisSettingRegistry"]
