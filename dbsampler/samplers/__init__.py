from dbsampler.samplers.base import BaseSampler
from dbsampler.samplers.copy_all import CopyAllSampler
from dbsampler.samplers.copy_empty import CopyEmptySampler
from dbsampler.samplers.limited import LimitSampler
from dbsampler.samplers.matched import MatchedSampler
from dbsampler.samplers.newest_by_id import NewestByIdSampler
from dbsampler.samplers.registry import (
    SamplerRegistry,
    register_sampler,
    sampler_registry,
)

__all__ = [
    "BaseSampler",
    "CopyAllSampler",
    "CopyEmptySampler",
    "LimitSampler",
    "MatchedSampler",
    "NewestByIdSampler",
    "SamplerRegistry",
    "register_sampler",
    "sampler_registry",
]
