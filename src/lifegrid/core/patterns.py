"""Common Conway's Game of Life seed patterns."""

from typing import Dict, List, Optional, Tuple

from .world import World


class Pattern:
    """A named arrangement of living cells given as (row, col) pairs."""

    def __init__(self, name: str, cells: List[Tuple[int, int]], description: str = "") -> None:
        """Initialize a pattern.

        Args:
            name: Pattern name
            cells: List of (row, col) coordinates for living cells
            description: Optional description
        """
        self.name = name
        self.cells = cells
        self.description = description

    @classmethod
    def from_text(cls, name: str, text: str, description: str = "", alive: str = "O") -> "Pattern":
        """Build a pattern from a picture, one line per row.

        Args:
            name: Pattern name
            text: Rows of characters; ``alive`` marks a living cell
            description: Optional description
            alive: Character marking living cells

        Returns:
            New Pattern instance
        """
        lines = [line.strip() for line in text.strip().splitlines()]
        cells = [(r, c) for r, line in enumerate(lines) for c, ch in enumerate(line) if ch == alive]
        return cls(name, cells, description)

    @classmethod
    def from_world(cls, world: World, name: str, description: str = "") -> "Pattern":
        """Create pattern from the current generation of a world."""
        cells = [(r, c) for r, row in enumerate(world.iter_rows()) for c, v in enumerate(row) if v]
        return cls(name, cells, description)

    def apply_to_world(self, world: World, offset_row: int = 0, offset_col: int = 0) -> None:
        """Clear a world and stamp this pattern onto it.

        Args:
            world: Target world
            offset_row: Vertical offset
            offset_col: Horizontal offset
        """
        world.clear()
        for r, c in self.cells:
            try:
                world.set_cell(r + offset_row, c + offset_col, True)
            except IndexError:
                # Skip cells that fall outside world bounds
                pass

    def get_bounding_box(self) -> Tuple[int, int, int, int]:
        """Get bounding box of the pattern.

        Returns:
            Tuple of (min_row, min_col, max_row, max_col)
        """
        if not self.cells:
            return (0, 0, 0, 0)

        rows, cols = zip(*self.cells)
        return (min(rows), min(cols), max(rows), max(cols))

    def get_size(self) -> Tuple[int, int]:
        """Get pattern size as (rows, cols)."""
        min_r, min_c, max_r, max_c = self.get_bounding_box()
        return (max_r - min_r + 1, max_c - min_c + 1)

    def normalize(self) -> "Pattern":
        """Return a new pattern with coordinates shifted to start at (0, 0)."""
        if not self.cells:
            return Pattern(self.name, [], self.description)

        min_r, min_c, _, _ = self.get_bounding_box()
        return Pattern(self.name, [(r - min_r, c - min_c) for r, c in self.cells], self.description)


_BUILTIN = [
    ("Still Life", "Block", "2x2 still life block", """
        OO
        OO
    """),
    ("Still Life", "Beehive", "Beehive still life", """
        .OO.
        O..O
        .OO.
    """),
    ("Still Life", "Loaf", "Loaf still life", """
        .OO.
        O..O
        .O.O
        ..O.
    """),
    ("Oscillators", "Blinker", "Period-2 oscillator", """
        OOO
    """),
    ("Oscillators", "Toad", "Period-2 oscillator", """
        .OOO
        OOO.
    """),
    ("Oscillators", "Beacon", "Period-2 oscillator", """
        OO..
        O...
        ...O
        ..OO
    """),
    ("Oscillators", "Pulsar", "Period-3 oscillator", """
        ..OOO...OOO..
        .............
        O....O.O....O
        O....O.O....O
        O....O.O....O
        ..OOO...OOO..
        .............
        ..OOO...OOO..
        O....O.O....O
        O....O.O....O
        O....O.O....O
        .............
        ..OOO...OOO..
    """),
    ("Spaceships", "Glider", "Smallest spaceship, period-4", """
        .O.
        ..O
        OOO
    """),
    ("Spaceships", "Lightweight Spaceship", "LWSS - Period-4 spaceship", """
        O..O.
        ....O
        O...O
        .OOOO
    """),
    ("Methuselahs", "R-pentomino", "Famous methuselah that stabilizes after 1103 generations", """
        .OO
        OO.
        .O.
    """),
    ("Methuselahs", "Diehard", "Dies after exactly 130 generations", """
        ......O.
        OO......
        .O...OOO
    """),
    ("Methuselahs", "Acorn", "Takes 5206 generations to stabilize", """
        .O.....
        ...O...
        OO..OOO
    """),
]


class PatternLibrary:
    """In-memory collection of named patterns."""

    def __init__(self) -> None:
        self._patterns: Dict[str, Pattern] = {}
        self._categories: Dict[str, List[str]] = {}
        self._load_builtin_patterns()

    def _load_builtin_patterns(self) -> None:
        for category, name, description, picture in _BUILTIN:
            self.add_pattern(Pattern.from_text(name, picture, description), category)

    def add_pattern(self, pattern: Pattern, category: str = "Custom") -> None:
        """Add a pattern to the library.

        Args:
            pattern: Pattern to add
            category: Category to list it under
        """
        self._patterns[pattern.name] = pattern
        names = self._categories.setdefault(category, [])
        if pattern.name not in names:
            names.append(pattern.name)

    def get_pattern(self, name: str) -> Optional[Pattern]:
        """Get a pattern by name, or None if not found."""
        return self._patterns.get(name)

    def list_patterns(self) -> List[str]:
        """Get list of all pattern names."""
        return list(self._patterns.keys())

    def get_patterns_by_category(self) -> Dict[str, List[str]]:
        """Get patterns organized by category.

        Returns:
            Dictionary mapping categories to pattern name lists
        """
        return {cat: list(names) for cat, names in self._categories.items() if names}
