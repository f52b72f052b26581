from typing import List

from dbsampler.samplers.base import BaseSampler, Row, non_negative_int
from dbsampler.samplers.registry import register_sampler
from dbsampler.spec import MigrationSpec


@register_sampler("newestbyid")
class NewestByIdSampler(BaseSampler):
    """Copy the 'quantity' rows with the highest 'idField' (default: id)."""

    @classmethod
    def validate(cls, spec: MigrationSpec) -> None:
        non_negative_int(spec, "quantity", cls.sampler_name)

    def get_rows(self) -> List[Row]:
        quantity = non_negative_int(self.spec, "quantity", self.name)
        if quantity == 0:
            return []
        id_field = self.spec.get("idField", self.spec.get("id_field", "id"))
        return self.source.fetch(order_by=[f"{id_field} DESC"], limit=quantity)
