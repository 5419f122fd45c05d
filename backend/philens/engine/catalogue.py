"""Educational content per pattern class, consumed by UI and narration layers."""

from __future__ import annotations

from dataclasses import dataclass

from philens.engine.patterns import PatternClass, exhaustive


@dataclass(frozen=True)
class PatternInfo:
    title: str
    description: str
    mathematical_explanation: str
    examples: tuple[str, ...]
    fun_facts: tuple[str, ...]


CATALOGUE = exhaustive(
    {
        PatternClass.SPIRAL_FIBONACCI: PatternInfo(
            title="Fibonacci Spiral",
            description=(
                "A spiral that grows according to the Fibonacci sequence, "
                "found in shells, galaxies, and flowers."
            ),
            mathematical_explanation=(
                "Quarter circles drawn in squares with Fibonacci side lengths. "
                "The ratio of consecutive Fibonacci numbers approaches the golden "
                "ratio (phi ~ 1.618)."
            ),
            examples=("Nautilus shells", "Galaxy arms", "Hurricane patterns", "Flower petals"),
            fun_facts=(
                "Also called the golden spiral",
                "It appears in the arrangement of leaves on plants",
                "Galaxies often have spiral arms following this pattern",
            ),
        ),
        PatternClass.GOLDEN_RATIO: PatternInfo(
            title="Golden Ratio",
            description=(
                "The ratio of approximately 1.618, considered aesthetically "
                "pleasing and found throughout nature."
            ),
            mathematical_explanation=(
                "phi = (1 + sqrt(5)) / 2 ~ 1.618, the positive solution of "
                "phi^2 = phi + 1, and the limit of F(n+1) / F(n)."
            ),
            examples=(
                "Human body proportions",
                "Parthenon architecture",
                "Mona Lisa composition",
                "DNA helix",
            ),
            fun_facts=(
                "Also known as the divine proportion",
                "Used in the design of credit cards",
                "Appears in the proportions of the human face",
            ),
        ),
        PatternClass.FIBONACCI_SEQUENCE: PatternInfo(
            title="Fibonacci Sequence",
            description=(
                "A sequence where each number is the sum of the two preceding "
                "ones: 1, 1, 2, 3, 5, 8, 13..."
            ),
            mathematical_explanation=(
                "F(n) = F(n-1) + F(n-2) with F(0) = 0, F(1) = 1. The ratio "
                "F(n+1) / F(n) approaches phi as n increases."
            ),
            examples=("Rabbit breeding", "Pinecone spirals", "Flower petal counts", "Tree branching"),
            fun_facts=(
                "Named after Leonardo of Pisa (Fibonacci)",
                "Appears in the breeding patterns of rabbits",
                "Used in computer algorithms and data structures",
            ),
        ),
        PatternClass.PHI_GRID: PatternInfo(
            title="Phi Grid",
            description=(
                "A grid system based on the golden ratio, used in art and "
                "architecture for harmonious proportions."
            ),
            mathematical_explanation=(
                "A grid whose cells have sides in the ratio 1:phi, dividing each "
                "axis at 0.382 and 0.618 of its length."
            ),
            examples=(
                "Renaissance paintings",
                "Modern web design",
                "Photography composition",
                "Architectural layouts",
            ),
            fun_facts=(
                "Used by ancient Greek architects",
                "Found in the design of the Great Pyramid",
                "Used in modern graphic design principles",
            ),
        ),
        PatternClass.SUNFLOWER_SPIRAL: PatternInfo(
            title="Sunflower Spiral",
            description=(
                "The spiral arrangement of seeds in a sunflower follows "
                "Fibonacci numbers for optimal packing."
            ),
            mathematical_explanation=(
                "Seeds are placed 137.5 degrees (360 / phi^2) apart, giving "
                "Fibonacci numbers of visible spirals."
            ),
            examples=("Sunflower seeds", "Daisy centers", "Pineapple patterns", "Artichoke leaves"),
            fun_facts=(
                "The angle 137.5 degrees is called the golden angle",
                "This arrangement maximizes seed packing",
                "Found in over 90% of sunflower varieties",
            ),
        ),
        PatternClass.PINECONE_SPIRAL: PatternInfo(
            title="Pinecone Spiral",
            description=(
                "Pinecone scales are arranged in spirals that follow Fibonacci "
                "numbers for efficient growth."
            ),
            mathematical_explanation=(
                "Scales form Fibonacci numbers of clockwise and counterclockwise spirals."
            ),
            examples=("Pine cones", "Fir cones", "Spruce cones", "Cedar cones"),
            fun_facts=(
                "Usually has 8 and 13 spirals",
                "The pattern helps with seed dispersal",
                "Found in most coniferous trees",
            ),
        ),
        PatternClass.SHELL_SPIRAL: PatternInfo(
            title="Shell Spiral",
            description=(
                "Shells grow in logarithmic spirals that approximate the golden "
                "ratio for structural strength."
            ),
            mathematical_explanation=(
                "Material is added at a constant angle, so r = a * e^(b * theta): "
                "a logarithmic spiral."
            ),
            examples=("Nautilus shells", "Snail shells", "Ammonite fossils", "Chambered nautilus"),
            fun_facts=(
                "Provides maximum strength with minimum material",
                "The spiral grows at a constant rate",
                "Found in marine animals for millions of years",
            ),
        ),
        PatternClass.NAUTILUS_SPIRAL: PatternInfo(
            title="Nautilus Spiral",
            description=(
                "A logarithmic spiral with chambers that grow by roughly the "
                "golden ratio."
            ),
            mathematical_explanation=(
                "New chambers are added at a constant angle, each about 1.618 "
                "times larger than the previous one."
            ),
            examples=(
                "Chambered nautilus",
                "Nautilus pompilius",
                "Fossil nautiloids",
                "Cross-section of nautilus shells",
            ),
            fun_facts=(
                "The nautilus has remained largely unchanged for 500 million years",
                "Each chamber is sealed off as the nautilus grows",
                "Its cross-section is the classic picture of a logarithmic spiral",
            ),
        ),
        PatternClass.LEAF_ARRANGEMENT: PatternInfo(
            title="Leaf Arrangement",
            description=(
                "Leaves are arranged in patterns that follow Fibonacci numbers "
                "to maximize sunlight exposure."
            ),
            mathematical_explanation=(
                "Successive leaves are rotated by the golden angle, 360 / phi^2 "
                "~ 137.5 degrees, which minimizes overlap."
            ),
            examples=("Tree leaves", "Plant stems", "Flower arrangements", "Branch patterns"),
            fun_facts=(
                "Called phyllotaxis in botany",
                "Helps plants maximize sunlight exposure",
                "Prevents leaves from shading each other",
            ),
        ),
    },
    "CATALOGUE",
)


def info_for(pattern: PatternClass) -> PatternInfo:
    return CATALOGUE[pattern]
