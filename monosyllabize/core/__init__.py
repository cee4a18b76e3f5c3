"""Core syllable modelling and assignment for monosyllabize."""

from .alternatives import (
    NO_VARIANT,
    NoVariant,
    Variant,
    VariantCategory,
    find_english_variants,
    generate_syllable_alternatives,
)
from .assignment import AssignMethod, AssignmentEngine, AssignmentRecord, AssignmentSession, AssignmentStats
from .candidate_pool import CandidatePool, CandidateSyllable, build_candidate_pool
from .cmudict_loader import CMUDictLoader, TranscriptionLoader, load_word_frequencies
from .converter import MonosyllabicTable, convert_text
from .lexicon import Dictionary, WordEntry
from .parameters import (
    AlternativeParameters,
    AssignmentParameters,
    GenerationParameters,
    GraphParameters,
    PartitionWeights,
    ScoringParameters,
)
from .partition import SyllableBoundaryAssigner
from .phonemes import group_ipa_symbols
from .respell import respell
from .scorer import SyllableScorer
from .sonority_graph import SonorityGraph

__all__ = [
    "AlternativeParameters",
    "AssignMethod",
    "AssignmentEngine",
    "AssignmentParameters",
    "AssignmentRecord",
    "AssignmentSession",
    "AssignmentStats",
    "CMUDictLoader",
    "CandidatePool",
    "CandidateSyllable",
    "Dictionary",
    "GenerationParameters",
    "GraphParameters",
    "MonosyllabicTable",
    "NO_VARIANT",
    "NoVariant",
    "PartitionWeights",
    "ScoringParameters",
    "SonorityGraph",
    "SyllableBoundaryAssigner",
    "SyllableScorer",
    "TranscriptionLoader",
    "Variant",
    "VariantCategory",
    "WordEntry",
    "build_candidate_pool",
    "convert_text",
    "find_english_variants",
    "generate_syllable_alternatives",
    "group_ipa_symbols",
    "load_word_frequencies",
    "respell",
]
