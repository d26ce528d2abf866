from .edge_crowding import detect, first_hit, layout_narrative
from .engine import DeterministicScorer, ResolutionOnlyScorer, Scorer, score
from .grading import TIERS, select_tier, weighted_total

__all__ = [
    'detect',
    'first_hit',
    'layout_narrative',
    'score',
    'Scorer',
    'DeterministicScorer',
    'ResolutionOnlyScorer',
    'TIERS',
    'select_tier',
    'weighted_total',
]
