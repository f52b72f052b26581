from typing import List

from dbsampler.samplers.base import BaseSampler, Row
from dbsampler.samplers.registry import register_sampler


@register_sampler("copyall")
class CopyAllSampler(BaseSampler):
    """Copy every row, optionally ordered by 'orderBy'."""

    def get_rows(self) -> List[Row]:
        return self.source.fetch(order_by=self.order_by())
