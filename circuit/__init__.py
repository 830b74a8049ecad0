"""Regex circuit - configuration, witness bundles and the public facade."""

from .config import RegexCircuitConfig
from .data import CaptureWitness, MatchWitness
from .regex_circuit import RegexCircuit
from .walk import check_walk, check_walk_with_captures

__all__ = [
    "RegexCircuitConfig",
    "RegexCircuit",
    "MatchWitness",
    "CaptureWitness",
    "check_walk",
    "check_walk_with_captures",
]
