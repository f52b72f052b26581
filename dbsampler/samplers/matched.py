from typing import Any, Dict, List, Optional

from dbsampler.errors import ConfigurationError, UnknownReferenceError
from dbsampler.samplers.base import BaseSampler, Row, non_negative_int
from dbsampler.samplers.registry import register_sampler
from dbsampler.spec import MigrationSpec

REFERENCE_PREFIX = "$"


def _reference_name(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.startswith(REFERENCE_PREFIX):
        return value[len(REFERENCE_PREFIX):]
    return None


def _where_clauses(spec: MigrationSpec) -> List[str]:
    where = spec.get("where") or []
    if isinstance(where, str):
        return [where]
    return list(where)


@register_sampler("matched")
class MatchedSampler(BaseSampler):
    """Copy rows matching every configured constraint.

    A constraint maps a column to a literal, a list of literals, or
    "$reference" for the values remembered under that name by an earlier
    table. Optional raw 'where' conditions, 'orderBy' and 'limit' apply on top.

    Example:
        orders:
          sampler: matched
          constraints:
            customer_id: $customer_ids
            status: [paid, shipped]
    """

    @classmethod
    def validate(cls, spec: MigrationSpec) -> None:
        constraints = spec.get("constraints") or {}
        if not isinstance(constraints, dict):
            raise ConfigurationError(
                "'constraints' must map column names to values or $references",
                table=spec.table,
                sampler=cls.sampler_name,
            )
        if not constraints and not _where_clauses(spec):
            raise ConfigurationError(
                "'constraints' or 'where' missing from config required by "
                f"sampler '{cls.sampler_name}'",
                table=spec.table,
                sampler=cls.sampler_name,
            )
        for name in cls.references(spec):
            if not name:
                raise ConfigurationError(
                    "Empty reference name in 'constraints'",
                    table=spec.table,
                    sampler=cls.sampler_name,
                )
        if spec.get("limit") is not None:
            non_negative_int(spec, "limit", cls.sampler_name)

    @classmethod
    def references(cls, spec: MigrationSpec) -> List[str]:
        constraints = spec.get("constraints") or {}
        if not isinstance(constraints, dict):
            return []
        names = [_reference_name(value) for value in constraints.values()]
        return [name for name in names if name is not None]

    def _resolve_constraints(self) -> Dict[str, List[Any]]:
        match = {}
        for column, value in (self.spec.get("constraints") or {}).items():
            reference = _reference_name(value)
            if reference is not None:
                if self.strict_references and not self.reference_store.has(reference):
                    raise UnknownReferenceError(
                        reference, table=self.table_name, sampler=self.name
                    )
                # NULL never matches a key, and duplicates only bloat the query
                values = [
                    v
                    for v in dict.fromkeys(self.reference_store.lookup(reference))
                    if v is not None
                ]
            elif isinstance(value, (list, tuple)):
                values = list(value)
            else:
                values = [value]
            match[column] = values
        return match

    def get_rows(self) -> List[Row]:
        match = self._resolve_constraints()
        if any(not values for values in match.values()):
            return []

        limit = None
        if self.spec.get("limit") is not None:
            limit = non_negative_int(self.spec, "limit", self.name)
            if limit == 0:
                return []

        return self.source.fetch(
            match=match,
            where=_where_clauses(self.spec),
            order_by=self.order_by(),
            limit=limit,
        )
