from typing import List

from dbsampler.samplers.base import BaseSampler, Row
from dbsampler.samplers.registry import register_sampler


@register_sampler("copyempty")
class CopyEmptySampler(BaseSampler):
    """Copy the table structure only."""

    def get_rows(self) -> List[Row]:
        return []
