
import time
import numpy as np
import os
import sys

# Add src to path
sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))

from bitsync import BitArray, BitStreamMatch, find_start_codes

def benchmark_view_read(nbytes=1 << 16):
    print(f"\n--- BitArray read Benchmark ({nbytes} bytes) ---")
    data = np.random.randint(0, 256, nbytes, dtype=np.uint8)
    view = BitArray(data)

    start_time = time.time()
    ones = sum(view.bits())
    duration = (time.time() - start_time) * 1000

    print(f"Time: {duration:.2f} ms")
    print(f"Set bits: {ones} of {len(view)}")

def benchmark_matcher(nbits=1 << 20):
    print(f"\n--- BitStreamMatch Benchmark ({nbits} bits) ---")
    stream = np.random.randint(0, 2, nbits, dtype=np.uint8).tolist()
    matcher = BitStreamMatch("0000000000000000000000010110")

    start_time = time.time()
    hits = matcher.handle_bits(stream)
    duration = (time.time() - start_time) * 1000

    print(f"Time: {duration:.2f} ms ({nbits / duration:.0f} bits/ms)")
    print(f"Matches: {len(hits)}")

def benchmark_start_codes(nbytes=1 << 14):
    print(f"\n--- Annex B start code Benchmark ({nbytes} bytes) ---")
    # Random payload with a start code every 1 KiB
    data = bytearray(np.random.randint(1, 256, nbytes, dtype=np.uint8).tobytes())
    for off in range(0, nbytes - 3, 1024):
        data[off:off + 3] = b'\x00\x00\x01'

    start_time = time.time()
    positions = find_start_codes(data)
    duration = (time.time() - start_time) * 1000

    print(f"Time: {duration:.2f} ms")
    print(f"Start codes: {len(positions)}")

if __name__ == "__main__":
    print("Running Benchmarks...")

    benchmark_view_read()
    benchmark_matcher()
    benchmark_start_codes()

    print("\nBenchmarks Complete.")
