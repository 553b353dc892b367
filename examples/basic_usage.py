"""
stl2mitl Basic Usage Example

This example converts an STL formula into a partitioned MITL formula using
a custom signal model, then writes the result to a .mitl file.
"""

from stl2mitl import (
    ConverterConfig,
    PredicateBehavior,
    RoundingMode,
    SignalModel,
    STLToMITLConverter,
    TemporalPattern,
)


def main():
    """Demonstrate basic stl2mitl usage."""

    print("=" * 60)
    print("stl2mitl - Basic Usage Example")
    print("=" * 60)

    # =========================================================================
    # Step 1: Describe the observed signal
    # =========================================================================
    print("\n[1] Describing predicate behaviour...")

    signal_model = SignalModel(
        {
            "speed > 20": PredicateBehavior.holds_on((0, 12), (18, 40)),
            "gap < 5.5": PredicateBehavior.holds_on((6, 14)),
            "brake >= 1": PredicateBehavior.holds_on((13.6, 22)),
        },
        step=0.1,
    )
    print(f"  ✓ {len(signal_model.behaviors)} predicate behaviours configured")

    # =========================================================================
    # Step 2: Configure the converter
    # =========================================================================
    print("\n[2] Configuring converter...")

    config = ConverterConfig(
        horizon=40,
        rounding=RoundingMode.HALF_EVEN,
        # Target written against the STL predicates, resolved after renaming
        target=TemporalPattern.until("gap < 5.5", "brake >= 1"),
        show_samples=False,
    )
    converter = STLToMITLConverter(config, signal_model=signal_model)

    # =========================================================================
    # Step 3: Convert
    # =========================================================================
    print("\n[3] Converting formula...")

    stl_formula = "(speed > 20) ∧ G [0, 40] ((gap < 5.5) U (brake >= 1))"
    result = converter.convert(stl_formula)

    print(f"  ✓ Predicates: {', '.join(p.text for p in result.predicates)}")
    print(f"  ✓ Partition points: {list(result.partition_points)}")
    print(f"  ✓ MITL: {result.mitl_formula}")

    # =========================================================================
    # Step 4: Write the result
    # =========================================================================
    print("\n[4] Writing output...")

    path = converter.write(result, "braking")
    if path is not None:
        print(f"  ✓ Written to {path}")

    print("\n" + "=" * 60)
    print("Example complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
