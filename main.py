"""
Forest Strata - Light Model Demo

Prints the live-conditions readout for the Indian forest presets and
optionally renders a forest cross-section:

    python main.py                         # every preset
    python main.py --preset tropical-thorn --sun-angle 10
    python main.py --preset montane --save montane.png
"""

import argparse

from strata import (
    FOREST_PRESETS,
    evaluate_forest,
    print_sensitivity_report,
    resolve_preset,
    save_forest,
)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Forest strata light model demo")
    parser.add_argument("--preset", help="Preset id (default: all presets)")
    parser.add_argument("--sun-angle", type=float, help="Override the preset sun angle")
    parser.add_argument("--save", help="Render the selected preset to this PNG path")
    parser.add_argument(
        "--sensitivity", action="store_true", help="Print the sensitivity table"
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()

    print("\n" + "=" * 60)
    print("  FOREST STRATA: Light Through Indian Forest Layers")
    print("=" * 60)

    if args.preset is not None:
        preset = resolve_preset(args.preset)
        if preset is None:
            ids = ", ".join(p.id for p in FOREST_PRESETS)
            print(f"Unknown preset {args.preset!r}. Available: {ids}")
            raise SystemExit(2)
        presets = [preset]
    else:
        presets = list(FOREST_PRESETS)

    for preset in presets:
        controls = preset.controls()
        if args.sun_angle is not None:
            controls = controls._replace(sun_angle=args.sun_angle)

        snapshot = evaluate_forest(controls, preset)
        snapshot.print_summary()

        if args.sensitivity:
            print_sensitivity_report(controls)

        if args.save is not None and len(presets) == 1:
            save_forest(args.save, controls, preset)

    if args.save is not None and len(presets) > 1:
        print("\n--save needs --preset; nothing rendered.")


if __name__ == "__main__":
    main()
