from typing import Dict, List, Type

from dbsampler.errors import ConfigurationError
from dbsampler.references import ReferenceStore
from dbsampler.samplers.base import BaseSampler
from dbsampler.spec import MigrationSpec


class SamplerRegistry:
    """Registry mapping sampler identifiers to sampler classes."""

    def __init__(self):
        self._samplers: Dict[str, Type[BaseSampler]] = {}

    def register(self, sampler_type: str, sampler_class: Type[BaseSampler]):
        """Register a sampler class under an identifier."""
        key = sampler_type.lower()
        if key in self._samplers:
            raise ValueError(f"Sampler type '{sampler_type}' is already registered")
        self._samplers[key] = sampler_class

    def get(self, sampler_type: str) -> Type[BaseSampler]:
        """Get a sampler class."""
        key = sampler_type.lower()
        if key not in self._samplers:
            raise ConfigurationError(
                f"Unrecognised sampler type '{sampler_type}' required",
                sampler=sampler_type,
            )
        return self._samplers[key]

    def available(self) -> List[str]:
        return sorted(self._samplers)

    def copy(self) -> "SamplerRegistry":
        registry = SamplerRegistry()
        registry._samplers = dict(self._samplers)
        return registry

    def validate(self, spec: MigrationSpec) -> Type[BaseSampler]:
        """Resolve and validate the sampler for a spec without building it."""
        try:
            sampler_class = self.get(spec.sampler)
        except ConfigurationError as e:
            raise ConfigurationError(
                e.message, table=spec.table, sampler=spec.sampler
            ) from e
        sampler_class.validate(spec)
        return sampler_class

    def build(
        self,
        spec: MigrationSpec,
        reference_store: ReferenceStore,
        source,
        strict_references: bool = False,
    ) -> BaseSampler:
        """Build the configured sampler for a table."""
        sampler_class = self.validate(spec)
        return sampler_class(
            spec,
            reference_store,
            source,
            spec.table,
            strict_references=strict_references,
        )


sampler_registry = SamplerRegistry()


def register_sampler(sampler_type: str):
    def decorator(sampler_class):
        sampler_class.sampler_name = sampler_type.lower()
        sampler_registry.register(sampler_type, sampler_class)
        return sampler_class

    return decorator
