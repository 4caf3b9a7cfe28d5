"""Overapproximation engine for lazyconvex.

Converts any lazy set into a concrete bounded representation that contains
it: a box, a polygon, a template polytope, a zonotope or an interval.

Public API:
    - overapproximate: Dispatch on the requested target representation.
    - box_approximation, overapproximate_polygon, overapproximate_template,
      overapproximate_zonotope_hull, overapproximate_interval,
      overapproximate_intersection: The individual conversions.
    - BoxDirections, OctDirections, BoxDiagDirections, CustomDirections:
      Template direction families.
    - PolygonRefiner, SupportDirectionRefiner: Epsilon-close polygon
      refinement.
"""

from lazyconvex.approximations.directions import (
    BoxDiagDirections,
    BoxDirections,
    CustomDirections,
    Directions,
    OctDirections,
)
from lazyconvex.approximations.overapproximate import (
    box_approximation,
    overapproximate,
    overapproximate_interval,
    overapproximate_intersection,
    overapproximate_polygon,
    overapproximate_template,
    overapproximate_zonotope_hull,
)
from lazyconvex.approximations.refinement import PolygonRefiner, SupportDirectionRefiner

__all__ = [
    "BoxDiagDirections",
    "BoxDirections",
    "CustomDirections",
    "Directions",
    "OctDirections",
    "PolygonRefiner",
    "SupportDirectionRefiner",
    "box_approximation",
    "overapproximate",
    "overapproximate_interval",
    "overapproximate_intersection",
    "overapproximate_polygon",
    "overapproximate_template",
    "overapproximate_zonotope_hull",
]
