"""Phonotactic transition model learned from real syllables.

Every syllable is split into onset, nucleus and coda. Each part keeps its own
table of ``phoneme -> {next phoneme: count}`` edges. ``None`` plays two roles:
as a key in the onset table it is the synthetic start, as a destination it is
the synthetic end. The last onset phoneme links to the first nucleus phoneme
and the last nucleus phoneme to the first coda phoneme, so a walk moves on to
the next part whenever the phoneme it reached is not a key of the current one.
"""

from __future__ import annotations

import random
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Set, Tuple

from monosyllabize.errors import ArtifactError
from monosyllabize.utils.observability import get_logger

from .parameters import GraphParameters
from .phonemes import Phoneme, Syllable, split_syllable

START: Optional[Phoneme] = None
STOP: Optional[Phoneme] = None

PART_NAMES: Tuple[str, str, str] = ("onset", "vowel", "coda")

Transitions = Dict[Optional[Phoneme], int]
GraphPart = Dict[Optional[Phoneme], Transitions]
Option = Tuple[Optional[Phoneme], float]

_LOGGER = get_logger(__name__).bind(component="sonority_graph")


def weighted_random_choice(options: Sequence[Option], rng: random.Random) -> Optional[Phoneme]:
    """Pick a destination with probability proportional to its weight.

    Cumulative sum followed by a linear scan for the first running total
    exceeding a uniform draw.
    """

    if not options:
        raise ValueError("weighted_random_choice requires at least one option")
    cumulative: List[float] = []
    total = 0.0
    for _, weight in options:
        total += weight
        cumulative.append(total)
    draw = rng.random() * total
    for index, running in enumerate(cumulative):
        if running > draw:
            return options[index][0]
    return options[-1][0]


class _Palette:
    """Walk state for palette restricted generation."""

    def __init__(self, phonemes: Sequence[Phoneme], *, force_order: bool, use_once_only: bool, decay: float) -> None:
        self.phonemes = list(phonemes)
        self.force_order = force_order
        self.use_once_only = use_once_only
        self.decay = decay
        self.cursor = 0
        self.used: Set[int] = set()

    def _positions(self, phoneme: Phoneme) -> List[int]:
        return [
            index
            for index, candidate in enumerate(self.phonemes)
            if candidate == phoneme and not (self.use_once_only and index in self.used)
        ]

    def _distance(self, position: int) -> int:
        if position >= self.cursor:
            return position - self.cursor
        return len(self.phonemes) + (self.cursor - position)

    def _nearest(self, phoneme: Phoneme) -> Optional[int]:
        positions = self._positions(phoneme)
        if not positions:
            return None
        return min(positions, key=self._distance)

    def weight(self, phoneme: Optional[Phoneme], count: int) -> Optional[float]:
        if phoneme is STOP:
            return float(count)
        position = self._nearest(phoneme)
        if position is None:
            return None
        if not self.force_order:
            return float(count)
        return count * self.decay ** self._distance(position)

    def consume(self, phoneme: Phoneme) -> None:
        position = self._nearest(phoneme)
        if position is None:
            return
        self.used.add(position)
        self.cursor = position + 1


class SonorityGraph:
    """Onset, nucleus and coda transition tables."""

    def __init__(
        self,
        parts: Optional[Sequence[GraphPart]] = None,
        params: Optional[GraphParameters] = None,
    ) -> None:
        if parts is None:
            parts = ({}, {}, {})
        if len(parts) != 3:
            raise ValueError("a sonority graph has exactly three parts")
        self.parts: Tuple[GraphPart, GraphPart, GraphPart] = (parts[0], parts[1], parts[2])
        self.params = params or GraphParameters()
        self.skipped_syllables = 0

    @classmethod
    def build(
        cls,
        syllables: Iterable[Sequence[Phoneme]],
        params: Optional[GraphParameters] = None,
    ) -> "SonorityGraph":
        graph = cls(params=params)
        for syllable in syllables:
            graph.add_syllable(syllable)
        if graph.skipped_syllables:
            _LOGGER.debug(
                "Skipped syllables without a nucleus",
                context={"count": graph.skipped_syllables},
            )
        return graph

    @property
    def onset(self) -> GraphPart:
        return self.parts[0]

    @property
    def nucleus(self) -> GraphPart:
        return self.parts[1]

    @property
    def coda(self) -> GraphPart:
        return self.parts[2]

    def _increment(self, part: GraphPart, key: Optional[Phoneme], nxt: Optional[Phoneme]) -> None:
        transitions = part.setdefault(key, {})
        transitions[nxt] = transitions.get(nxt, 0) + 1

    def _chain(self, part: GraphPart, phonemes: Sequence[Phoneme], following: Optional[Phoneme]) -> None:
        for index, phoneme in enumerate(phonemes):
            nxt = phonemes[index + 1] if index + 1 < len(phonemes) else following
            self._increment(part, phoneme, nxt)

    def add_syllable(self, syllable: Sequence[Phoneme]) -> None:
        onset, nucleus, coda = split_syllable(syllable)
        if not nucleus:
            self.skipped_syllables += 1
            return
        first_coda = coda[0] if coda else STOP
        self._increment(self.onset, START, onset[0] if onset else nucleus[0])
        self._chain(self.onset, onset, nucleus[0])
        self._chain(self.nucleus, nucleus, first_coda)
        self._chain(self.coda, coda, STOP)

    def edge_count(self, part_index: int, key: Optional[Phoneme], nxt: Optional[Phoneme]) -> int:
        return self.parts[part_index].get(key, {}).get(nxt, 0)

    def _walk(
        self,
        rng: random.Random,
        options: Callable[[Transitions, Dict[Phoneme, int]], List[Option]],
        consume: Optional[Callable[[Phoneme], None]] = None,
    ) -> Optional[Syllable]:
        starts = self.onset.get(START)
        if not starts:
            return None
        uses: Dict[Phoneme, int] = {}
        choices = options(starts, uses)
        if not choices:
            return None
        current = weighted_random_choice(choices, rng)

        phonemes: List[Phoneme] = []
        part_index = 0
        while current is not STOP:
            while part_index < 3 and current not in self.parts[part_index]:
                part_index += 1
                uses = {}
            if part_index >= 3:
                return None
            phonemes.append(current)
            uses[current] = uses.get(current, 0) + 1
            if consume is not None:
                consume(current)
            choices = options(self.parts[part_index][current], uses)
            if not choices:
                return None
            current = weighted_random_choice(choices, rng)
        return tuple(phonemes)

    def _unrestricted_options(self, transitions: Transitions, uses: Dict[Phoneme, int]) -> List[Option]:
        limit = self.params.max_repeats_per_part
        return [
            (nxt, float(count))
            for nxt, count in transitions.items()
            if nxt is STOP or uses.get(nxt, 0) < limit
        ]

    def generate_random_syllable(self, rng: Optional[random.Random] = None) -> Syllable:
        """Weighted random walk from start to end.

        A walk that runs out of legal continuations under the repeat limit
        is retried; an empty tuple means every attempt dead-ended.
        """

        rng = rng or random.Random()
        for _ in range(self.params.max_walk_attempts):
            result = self._walk(rng, self._unrestricted_options)
            if result:
                return result
        _LOGGER.debug("Random walk exhausted its attempts")
        return ()

    def generate_from_palette(
        self,
        palette: Sequence[Phoneme],
        *,
        force_order: bool = False,
        use_once_only: bool = False,
        rng: Optional[random.Random] = None,
    ) -> Optional[Syllable]:
        """Walk restricted to the phonemes of ``palette``.

        Only edges seen more than ``palette_min_support`` times whose
        destination is in the palette (or the end) are followed.
        ``force_order`` down-weights destinations far from the current
        palette position, ``use_once_only`` consumes palette entries as they
        are used. Returns ``None`` on a dead end or a single phoneme result.
        """

        rng = rng or random.Random()
        state = _Palette(
            palette,
            force_order=force_order,
            use_once_only=use_once_only,
            decay=self.params.order_decay,
        )
        limit = self.params.max_repeats_per_part
        support = self.params.palette_min_support

        def options(transitions: Transitions, uses: Dict[Phoneme, int]) -> List[Option]:
            allowed: List[Option] = []
            for nxt, count in transitions.items():
                if count <= support:
                    continue
                if nxt is not STOP and uses.get(nxt, 0) >= limit:
                    continue
                weight = state.weight(nxt, count)
                if weight is not None and weight > 0:
                    allowed.append((nxt, weight))
            return allowed

        result = self._walk(rng, options, state.consume)
        if result is None or len(result) < 2:
            return None
        return result

    def to_dict(self) -> Dict[str, List[List[object]]]:
        return {
            name: [
                [key, [[nxt, count] for nxt, count in transitions.items()]]
                for key, transitions in part.items()
            ]
            for name, part in zip(PART_NAMES, self.parts)
        }

    @classmethod
    def from_dict(
        cls,
        payload: Dict[str, object],
        params: Optional[GraphParameters] = None,
    ) -> "SonorityGraph":
        parts: List[GraphPart] = []
        try:
            for name in PART_NAMES:
                part: GraphPart = {}
                for key, transitions in payload[name]:  # type: ignore[union-attr]
                    part[key] = {nxt: int(count) for nxt, count in transitions}
                parts.append(part)
        except (KeyError, TypeError, ValueError) as exc:
            raise ArtifactError(f"malformed sonority graph: {exc}") from exc
        return cls(parts, params=params)

    def to_dot(self) -> str:
        """Render the graph as Graphviz DOT, one cluster per part."""

        def node_name(phoneme: Optional[Phoneme], at_or_after: int) -> str:
            if phoneme is None:
                return "end"
            if at_or_after == 0 and phoneme in self.onset:
                prefix = "onset"
            elif at_or_after <= 1 and phoneme in self.nucleus:
                prefix = "vowel"
            else:
                prefix = "coda"
            return f'"{prefix}_{phoneme}"'

        edges = [f"    st -> {node_name(nxt, 0)};" for nxt in self.onset.get(START, {})]
        for index, part in enumerate(self.parts):
            for key, transitions in part.items():
                if key is None:
                    continue
                for nxt in transitions:
                    edges.append(f"    {node_name(key, index)} -> {node_name(nxt, index)};")

        clusters = []
        for index, (label, part) in enumerate(zip(PART_NAMES, self.parts)):
            nodes = "\n".join(
                f'        "{label}_{key}" [label="{key}"];' for key in part if key is not None
            )
            clusters.append(
                f"    subgraph cluster_{index} {{\n"
                f'        color = "blue";\n'
                f'        label = "{label}";\n'
                f"{nodes}\n"
                f"    }}"
            )

        lines = [
            'digraph "Sonority" {',
            "    rankdir=LR;",
            '    graph [fontsize=10 fontname="Verdana" compound=true];',
            '    node [shape=record fontsize=10 fontname="Verdana"];',
            '    st [label="Start"];',
            '    end [label="End"];',
            *edges,
            *clusters,
            "}",
        ]
        return "\n".join(lines) + "\n"


__all__ = [
    "START",
    "STOP",
    "PART_NAMES",
    "SonorityGraph",
    "weighted_random_choice",
]
