"""
Spatial searches and calculations executed against PostGIS.

`SpatialSearch` turns the predicates from `postgis_search.geo` into
statements, runs them on the shared connection and hands back rows or
converted scalars. Store errors are not caught here.
"""

import logging
from typing import Any, Iterable

from postgis_search.config import settings
from postgis_search.database import get_cursor
from postgis_search.geo import (
    DEFAULT_RADIUS_M,
    SIMPLIFY_TOLERANCE,
    SpatialFilter,
    bounding_box_filter,
    envelope,
    inset_bounding_box,
    meters_to_miles,
    nearest_filter,
    radius_filter,
    shape_containment_filter,
    square_meters_to_square_miles,
)
from postgis_search.geo.predicates import Location
from postgis_search.models import BoundingBox, SpatialEntity
from postgis_search.validation import quote_identifier

logger = logging.getLogger(__name__)


class SpatialSearch:
    """Searches one table of points and combines shapes from another."""

    def __init__(
        self,
        target_table: str | None = None,
        shape_table: str | None = None,
        point_column: str | None = None,
        shape_column: str | None = None,
    ):
        self.target_table = target_table or settings.target_table
        self.shape_table = shape_table or settings.shape_table
        self.point_column = point_column or settings.point_column
        self.shape_column = shape_column or settings.shape_column

        # Raises ValueError on names that are not plain identifiers
        self._target = quote_identifier(self.target_table)
        self._shapes = quote_identifier(self.shape_table)
        self._point = quote_identifier(self.point_column)
        self._shape = quote_identifier(self.shape_column)

    # -------------------------------------------------------------------------
    # Statement execution
    # -------------------------------------------------------------------------

    def _fetchall(self, sql: str, params: tuple) -> list[dict[str, Any]]:
        logger.debug("Executing %s with %r", sql, params)
        with get_cursor() as cursor:
            cursor.execute(sql, params)
            return list(cursor.fetchall())

    def _fetch_scalar(self, sql: str, params: tuple) -> Any:
        logger.debug("Executing %s with %r", sql, params)
        with get_cursor() as cursor:
            cursor.execute(sql, params)
            row = cursor.fetchone()
        if not row:
            return None
        return next(iter(row.values()))

    def execute_filter(
        self,
        where: SpatialFilter,
        order_by: SpatialFilter | None = None,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        """Run `SELECT *` on the target table with the given filter."""
        sql = f"SELECT * FROM {self._target} WHERE {where.sql}"
        params = where.params
        if order_by is not None:
            sql += f" ORDER BY {order_by.sql}"
            params += order_by.params
        if limit is not None:
            sql += " LIMIT %s"
            params += (limit,)
        return self._fetchall(sql, params)

    # -------------------------------------------------------------------------
    # Searches
    # -------------------------------------------------------------------------

    def objects_in_radius(
        self, location: Location, radius: float = DEFAULT_RADIUS_M
    ) -> list[dict[str, Any]] | None:
        """All rows within `radius` meters, or None if the location is unknown."""
        where = radius_filter(location, radius, column=self.point_column)
        if where is None:
            return None
        return self.execute_filter(where)

    def nearest_object(
        self, location: Location, radius: float = DEFAULT_RADIUS_M
    ) -> dict[str, Any] | None:
        """The closest row within `radius` meters, if any."""
        query = nearest_filter(location, radius, column=self.point_column)
        if query is None:
            return None
        rows = self.execute_filter(query.filter, query.order_by, query.limit)
        return rows[0] if rows else None

    def objects_in_shape(self, shape: str | None) -> list[dict[str, Any]] | None:
        """All rows covered by the shape, or None without a shape."""
        where = shape_containment_filter(shape, column=self.point_column)
        if where is None:
            return None
        return self.execute_filter(where)

    def objects_in_bounding_box(self, box: BoundingBox) -> list[dict[str, Any]]:
        """All rows covered by the lon/lat box, edges included."""
        return self.execute_filter(bounding_box_filter(box, column=self.point_column))

    def objects_in_radius_of(
        self, entity: SpatialEntity, radius: float = DEFAULT_RADIUS_M
    ) -> list[dict[str, Any]] | None:
        return self.objects_in_radius(entity.location(), radius)

    def nearest_object_to(
        self, entity: SpatialEntity, radius: float = DEFAULT_RADIUS_M
    ) -> dict[str, Any] | None:
        return self.nearest_object(entity.location(), radius)

    def objects_in_shape_of(self, entity: SpatialEntity) -> list[dict[str, Any]] | None:
        return self.objects_in_shape(entity.geog_shape)

    # -------------------------------------------------------------------------
    # Bounding box checks
    # -------------------------------------------------------------------------

    def bounding_box_contains(self, shape: str, box: BoundingBox) -> bool:
        """
        Check whether the shape reaches into the box.

        The check uses the inset box (see `inset_bounding_box`), so shapes
        touching only the outer tenth of either span do not count.
        """
        env = envelope(inset_bounding_box(box))
        result = self._fetch_scalar(
            f"SELECT ST_Intersects({env.sql}, %s::geography)",
            env.params + (shape,),
        )
        return bool(result)

    def bounding_box_within_radius(self, point: str, radius: float, box: BoundingBox) -> bool:
        """Check whether the inset box lies within `radius` meters of the point."""
        env = envelope(inset_bounding_box(box))
        result = self._fetch_scalar(
            f"SELECT ST_DWithin({env.sql}, %s::geography, %s)",
            env.params + (point, radius),
        )
        return bool(result)

    # -------------------------------------------------------------------------
    # Calculations
    # -------------------------------------------------------------------------

    def union_simplify(self, ids: Iterable[int]) -> str | None:
        """
        Combine the shapes of the given rows into one simplified geography.

        Returns the store's serialized result, or None when no row matched.
        """
        return self._fetch_scalar(
            f"SELECT ST_SimplifyPreserveTopology(ST_Union({self._shape}::geometry), %s)"
            f"::geography FROM {self._shapes} WHERE id = ANY(%s)",
            (SIMPLIFY_TOLERANCE, list(ids)),
        )

    def distance_between(self, entity: SpatialEntity, other_point: str) -> float | None:
        """Miles between the entity's stored point and another geography point."""
        if entity.geog_point is None:
            return None
        meters = self._fetch_scalar(
            f"SELECT ST_Distance({self._point}, %s::geography) "
            f"FROM {quote_identifier(entity.table)} WHERE id = %s",
            (other_point, entity.id),
        )
        if meters is None:
            return None
        return meters_to_miles(float(meters))

    def area_of_shape(self, entity: SpatialEntity) -> float | None:
        """Square miles covered by the entity's stored shape."""
        if entity.geog_shape is None:
            return None
        square_meters = self._fetch_scalar(
            f"SELECT ST_Area({self._shape}) FROM {quote_identifier(entity.table)} WHERE id = %s",
            (entity.id,),
        )
        if square_meters is None:
            return None
        return square_meters_to_square_miles(float(square_meters))

    def load_entity(self, table: str, entity_id: int | str) -> SpatialEntity | None:
        """Read one row of `table` as a searching entity."""
        rows = self._fetchall(
            f"SELECT * FROM {quote_identifier(table)} WHERE id = %s", (entity_id,)
        )
        if not rows:
            return None
        return SpatialEntity.from_row(
            table, rows[0], point_column=self.point_column, shape_column=self.shape_column
        )
