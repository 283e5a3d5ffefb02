import argparse
import logging
import sys
import time

from air_shower.config import config_from_dict, load_params, params_from_dict
from air_shower.rng import NumpyRandom
from air_shower.showers import HIT_FIELDS, PROFILE_FIELDS, run_showers, write_rows
from air_shower.species import Species


# =========================== Command Line ===========================

def build_parser():
    parser = argparse.ArgumentParser(description="Run air-shower cascades and save the ground hits to CSV")
    parser.add_argument("--species", default="proton", choices=[s.value for s in Species],
                        help="Primary particle species (default: proton)")
    parser.add_argument("--energy", type=float, default=5.0, help="Primary energy in TeV (default: 5.0)")
    parser.add_argument("--showers", type=int, default=10, help="Number of showers to simulate (default: 10)")
    parser.add_argument("--drive", type=float, default=None, help="Branching drive factor")
    parser.add_argument("--dt", type=float, default=0.02, help="Tick length in seconds (default: 0.02)")
    parser.add_argument("--max-ticks", type=int, default=5000, help="Tick limit per shower (default: 5000)")
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible runs")
    parser.add_argument("--params", default=None, help="JSON or TOML file with engine/params settings")
    parser.add_argument("--output", default=None, help="Hit CSV file name")
    parser.add_argument("--profile", default=None, help="Optional CSV file for the population profile")
    parser.add_argument("--verbose", action="store_true", help="Log engine events")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    settings = {}
    if args.params:
        try:
            settings = load_params(args.params)
        except (OSError, ValueError) as e:
            print(f"Error reading parameter file: {e}")
            return 1
    config = config_from_dict(settings)
    params = params_from_dict(settings)
    if args.drive is not None:
        params.drive_factor = args.drive

    rng = NumpyRandom(args.seed) if args.seed is not None else None

    output_filename = args.output or f"shower_hits_{args.species}_{args.energy:g}TeV_{args.showers}runs.csv"
    print(f"\nStarting simulation of {args.showers} {args.species} showers at {args.energy} TeV.")
    print(f"Ground hits will be saved to '{output_filename}'")
    start_time = time.time()

    def report(shower_id, ticks, hits):
        print(f"Shower {shower_id} finished after {ticks} ticks, recording {hits} ground hits.")

    result = run_showers(args.species, args.energy, args.showers, dt=args.dt, max_ticks=args.max_ticks,
                         config=config, params=params, rng=rng, progress=report)

    total_time = time.time() - start_time
    print(f"\n--- All {args.showers} simulations finished in {total_time:.2f} seconds ---")
    if result.unfinished:
        print(f"  --> {result.unfinished} showers hit the tick limit ({args.max_ticks}) before dying out.")

    if not result.hits:
        print("No particle reached the ground in any shower.")
    else:
        print(f"Saving {len(result.hits)} ground hits to {output_filename}...")
        try:
            write_rows(output_filename, result.hits, HIT_FIELDS)
            print(f"Successfully saved data to {output_filename}")
        except OSError as e:
            print(f"Error writing to file: {e}")
            return 1

    if args.profile:
        try:
            write_rows(args.profile, result.profile, PROFILE_FIELDS)
            print(f"Saved population profile to {args.profile}")
        except OSError as e:
            print(f"Error writing to file: {e}")
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
