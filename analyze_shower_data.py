import os
import sys

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

from air_shower.species import CATEGORIES, Species, color

CATEGORY_STYLES = {
    "muon": dict(color='red', linestyle=':', linewidth=2),
    "gamma": dict(color='teal', linestyle='--'),
    "electron": dict(color='blue', linestyle='--'),
    "hadrons": dict(color='darkorange', linestyle='-.'),
}


# =========================== Plotting Functions ===========================

def plot_avg_population_profile(profile_df, num_showers, filename):
    """Plots the average live population over time with the shower maximum marked."""
    print("  - Analyzing population profile...")
    max_time = profile_df['time'].max()
    bins = np.linspace(0, max_time * 1.05, 60)
    bin_centers = (bins[:-1] + bins[1:]) / 2

    # Showers that already died out have no rows, so they count as zero
    codes = np.clip(np.digitize(profile_df['time'].to_numpy(), bins) - 1, 0, len(bin_centers) - 1)
    binned = profile_df.assign(bin=codes)
    ticks_per_bin = binned.groupby(['bin', 'shower_id']).size().groupby('bin').max()
    per_bin = binned.groupby('bin')[['total', *CATEGORIES]].sum()
    avg = per_bin.div(ticks_per_bin * num_showers, axis=0).reindex(range(len(bin_centers)), fill_value=0)

    if len(avg) > 0 and avg['total'].max() > 0:
        peak_index = int(np.argmax(avg['total'].to_numpy()))
        peak_time = bin_centers[peak_index]
        max_particles = avg['total'].iloc[peak_index]
    else:
        peak_time, max_particles = None, None

    plt.figure(figsize=(12, 8))
    plt.style.use('seaborn-v0_8-whitegrid')

    plt.step(bin_centers, avg['total'], where='mid', color='black', label='All Particles', linewidth=2.5)
    for name, style in CATEGORY_STYLES.items():
        plt.step(bin_centers, avg[name], where='mid', label=f'{name.capitalize()}', **style)

    # --- Add annotation for the shower maximum ---
    if peak_time is not None:
        plt.axvline(peak_time, color='green', linestyle=':', linewidth=2, label=f'Peak = {peak_time:.2f} s')
        plt.annotate('Shower Maximum',
                     xy=(peak_time, max_particles),
                     xytext=(peak_time + max_time * 0.1, max_particles * 0.8),
                     arrowprops=dict(facecolor='green', shrink=0.05, width=1.5, headwidth=8),
                     fontsize=12,
                     bbox=dict(boxstyle="round,pad=0.3", fc="ivory", ec="gray", lw=1, alpha=0.8))

    plt.xlabel('Time since primary (s)', fontsize=14)
    plt.ylabel('Average Live Particles per Shower', fontsize=14)
    plt.title(f'Average Population Profile ({num_showers} Showers)', fontsize=16)
    plt.grid(True, which='both', linestyle='--', alpha=0.7)
    plt.legend(fontsize=12)
    plt.xlim(left=0)
    plt.tick_params(axis='both', which='major', labelsize=12)
    plt.savefig(filename, dpi=150)
    plt.close()
    print(f"  - Saved {filename}")
    return peak_time


def plot_ground_footprint(df, filename):
    """Scatter of every ground hit in the X/Z plane, coloured like the live view."""
    print("  - Analyzing ground footprint...")
    plt.figure(figsize=(10, 10))
    plt.style.use('dark_background')

    colours = df[['r', 'g', 'b']].clip(0, 1).to_numpy()
    plt.scatter(df['x'], df['z'], c=colours, s=6 + 14 * df['brightness'], alpha=0.8, edgecolors='none')

    # Legend entries use the undimmed species colour
    for name in sorted(df['species'].unique()):
        plt.scatter([], [], color=color(name), label=f'{name} ({(df["species"] == name).sum()})')

    plt.xlabel('X', fontsize=14)
    plt.ylabel('Z', fontsize=14)
    plt.title(f'Ground Footprint ({len(df)} hits)', fontsize=16)
    plt.gca().set_aspect('equal', adjustable='datalim')
    plt.legend(fontsize=10, loc='upper right')
    plt.savefig(filename, dpi=150)
    plt.close()
    plt.style.use('default')
    print(f"  - Saved {filename}")


def plot_hits_per_shower(df, num_showers, filename):
    """Histogram of the number of ground hits each shower produced."""
    print("  - Analyzing hits per shower...")
    hit_counts = df.groupby('shower_id').size()
    all_shower_counts = hit_counts.reindex(range(1, num_showers + 1), fill_value=0)

    plt.figure(figsize=(12, 8))
    plt.style.use('seaborn-v0_8-whitegrid')

    max_count = all_shower_counts.max()
    bins = np.arange(-0.5, max_count + 1.5, 1)
    plt.hist(all_shower_counts, bins=bins, color='darkorange', alpha=0.8, edgecolor='black', rwidth=0.8)

    mean_hits = all_shower_counts.mean()
    plt.axvline(mean_hits, color='red', linestyle='--', linewidth=2, label=f'Mean = {mean_hits:.2f} hits/shower')
    stats_text = f'Max hits in one shower: {max_count}\nShowers: {num_showers}'
    plt.text(0.95, 0.95, stats_text, transform=plt.gca().transAxes,
             fontsize=12, verticalalignment='top', horizontalalignment='right',
             bbox=dict(boxstyle='round,pad=0.5', fc='lightblue', alpha=0.4))

    plt.xlabel('Ground Hits per Shower', fontsize=14)
    plt.ylabel('Number of Showers', fontsize=14)
    plt.title('Distribution of Ground Hits per Shower', fontsize=16)
    plt.legend(fontsize=12)
    plt.tick_params(axis='both', which='major', labelsize=12)
    plt.savefig(filename, dpi=150)
    plt.close()
    print(f"  - Saved {filename}")


def plot_brightness_distribution(df, filename):
    print("  - Analyzing hit brightness...")
    bins = np.linspace(0.35, 1.0, 27)

    plt.figure(figsize=(12, 8))
    plt.style.use('seaborn-v0_8-whitegrid')
    for name, group in df.groupby('species'):
        plt.hist(group['brightness'], bins=bins, alpha=0.6, color=color(name),
                 label=f'{name} ({len(group)} hits, Mean={group["brightness"].mean():.2f})')

    plt.yscale('log')
    plt.xlabel('Brightness factor', fontsize=14)
    plt.ylabel('Number of Hits', fontsize=14)
    plt.title('Brightness of Ground Hits by Species', fontsize=16)
    plt.legend(fontsize=12)
    plt.tick_params(axis='both', which='major', labelsize=12)
    plt.savefig(filename, dpi=150)
    plt.close()
    print(f"  - Saved {filename}")


# =========================== Main analysis function ===========================

def analyze_shower_data(filename, profile_filename=None, output_dir=".", num_showers=None):
    """Reads a hit CSV (and optional profile CSV) and generates all plots and summaries.

    Showers with no ground hits leave no rows in the hit CSV, so the shower
    count comes from ``num_showers`` or the profile CSV when either is given.
    """
    try:
        df = pd.read_csv(filename)
    except FileNotFoundError:
        print(f"Error: The file '{filename}' was not found.")
        return None
    except pd.errors.EmptyDataError:
        df = pd.DataFrame()

    if df.empty:
        print("The data file is empty. No analysis to perform.")
        return None

    profile_df = pd.DataFrame()
    if profile_filename:
        try:
            profile_df = pd.read_csv(profile_filename)
        except FileNotFoundError:
            print(f"Error: The file '{profile_filename}' was not found.")
        except pd.errors.EmptyDataError:
            pass

    if num_showers is None:
        num_showers = df['shower_id'].max()
        if not profile_df.empty:
            num_showers = max(num_showers, profile_df['shower_id'].nunique())

    os.makedirs(output_dir, exist_ok=True)
    print("\n--- Overall Summary ---")
    print(f"Analyzed {num_showers} showers from '{filename}'")
    print(f"Total ground hits from all showers: {len(df)}")
    print(f"Average hits per shower: {len(df) / num_showers:.1f}")
    print("\nGround Hit Counts (All Showers):")
    counts = df['species'].value_counts().sort_index()
    for species, count in counts.items():
        print(f"  {species}: {count}")

    print("\nGenerating plots...")
    outputs = [os.path.join(output_dir, name) for name in
               ('ground_footprint.png', 'hits_per_shower.png', 'brightness_distribution.png')]
    plot_ground_footprint(df, outputs[0])
    plot_hits_per_shower(df, num_showers, outputs[1])
    plot_brightness_distribution(df, outputs[2])

    if not profile_df.empty:
        outputs.append(os.path.join(output_dir, 'avg_population_profile.png'))
        plot_avg_population_profile(profile_df, num_showers, outputs[-1])

    print("\nAnalysis complete. Plots have been saved as PNG files.")
    return {"showers": int(num_showers), "hits": len(df),
            "by_species": {Species.parse(k).value: int(v) for k, v in counts.items()},
            "plots": outputs}


# =========================== Executing the program ===========================

def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    if not argv:
        print("Usage: python analyze_shower_data.py <hits.csv> [profile.csv]")
        print("Example: python analyze_shower_data.py shower_hits_proton_5TeV_10runs.csv profile.csv")
        return 1
    summary = analyze_shower_data(argv[0], argv[1] if len(argv) > 1 else None)
    return 0 if summary is not None else 1


if __name__ == "__main__":
    sys.exit(main())
