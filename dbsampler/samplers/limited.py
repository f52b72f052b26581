from typing import List

from dbsampler.samplers.base import BaseSampler, Row, non_negative_int
from dbsampler.samplers.registry import register_sampler
from dbsampler.spec import MigrationSpec


@register_sampler("limit")
class LimitSampler(BaseSampler):
    """Copy at most 'limit' rows in source order, or in 'orderBy' order."""

    @classmethod
    def validate(cls, spec: MigrationSpec) -> None:
        non_negative_int(spec, "limit", cls.sampler_name)

    def get_rows(self) -> List[Row]:
        limit = non_negative_int(self.spec, "limit", self.name)
        if limit == 0:
            return []
        rows = self.source.fetch(order_by=self.order_by(), limit=limit)
        return rows[:limit]
