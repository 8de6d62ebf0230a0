"""IBD physics: differential cross-section and two-body kinematics."""

from ibdgen.physics.cross_section import (
    cross_section,
    cross_section_array,
    total_cross_section,
    total_cross_section_array,
)
from ibdgen.physics.kinematics import (
    FourMomentum,
    isotropic_direction,
    neutron_four_momentum,
    orthogonal,
    positron_energy,
    positron_energy_array,
    positron_momentum,
    rotate_about_axis,
    zeroth_order_positron,
)

__all__ = [
    "cross_section",
    "cross_section_array",
    "total_cross_section",
    "total_cross_section_array",
    "FourMomentum",
    "isotropic_direction",
    "neutron_four_momentum",
    "orthogonal",
    "positron_energy",
    "positron_energy_array",
    "positron_momentum",
    "rotate_about_axis",
    "zeroth_order_positron",
]
