"""Monte Carlo samplers: IBD interactions, events and vertex positions."""

from ibdgen.sampling.envelope import (
    EnvelopeReport,
    SamplingEnvelopeError,
    compute_envelope,
    validate_envelope,
)
from ibdgen.sampling.event_sampler import (
    IBDEvent,
    IBDEventSampler,
    Interaction,
    SamplerStatistics,
)
from ibdgen.sampling.vertex import VertexSampler, generate_vertex

__all__ = [
    "EnvelopeReport",
    "SamplingEnvelopeError",
    "compute_envelope",
    "validate_envelope",
    "IBDEvent",
    "IBDEventSampler",
    "Interaction",
    "SamplerStatistics",
    "VertexSampler",
    "generate_vertex",
]
