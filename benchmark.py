import io
import time

import click
import numpy as np

import bed_regions as br


def _make_bed(num_regions, lines_per_region, seed):
    rng = np.random.default_rng(seed)
    starts = rng.integers(0, 250_000_000, size=num_regions * lines_per_region)
    widths = rng.integers(1, 10_000, size=starts.shape)
    names = np.repeat([f"region{i}" for i in range(num_regions)], lines_per_region)
    lines = [f"{name}\t{s}\t{s + w}\n" for name, s, w in zip(names, starts, widths)]
    return ("# synthetic\n" + "".join(lines)).encode("ascii")


def _iterate_reader(data, chunk_size):
    reader = br.LineByLineReader(io.BytesIO(data), chunk_size=chunk_size)
    n = 0
    while reader.read_next_line():
        n += 1
    return n


@click.command()
@click.option('-r', '--num-regions', type=int, default=100, show_default=True)
@click.option('-l', '--lines-per-region', type=int, default=10_000, show_default=True)
@click.option('-c', '--chunk-size', type=int, default=br.line_reader.DEFAULT_CHUNK_SIZE, show_default=True)
@click.option('--seed', type=int, default=0, show_default=True)
@click.option('--no-reader', is_flag=True, default=False, help='Do not run the line reader bench')
def main(num_regions, lines_per_region, chunk_size, seed, no_reader):
    data = _make_bed(num_regions, lines_per_region, seed)
    print(f'input: {len(data) / 1024 / 1024:.1f} MB, {num_regions * lines_per_region} intervals')

    if not no_reader:
        t1 = time.time()
        n = _iterate_reader(data, chunk_size)
        t2 = time.time()
        print(f"Time for LineByLineReader over {n} lines: {t2 - t1:.3f} seconds")

        t1 = time.time()
        n = sum(1 for _ in io.BytesIO(data))
        t2 = time.time()
        print(f"Time for plain line iteration over {n} lines: {t2 - t1:.3f} seconds")

    t1 = time.time()
    regions = br.read_points_from_bed_file(io.BytesIO(data))
    t2 = time.time()
    print(f"Time for read_points_from_bed_file: {t2 - t1:.3f} seconds ({len(regions)} regions)")

    t1 = time.time()
    df = br.regions_to_frame(regions)
    t2 = time.time()
    print(f"Time for regions_to_frame: {t2 - t1:.3f} seconds ({df.shape[0]} rows)")


if __name__ == "__main__":
    main()
