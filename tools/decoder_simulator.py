#!/usr/bin/env python3
"""Fake rtl_433 for rtlmon.

Prints one JSON object per line on stdout, the way ``rtl_433 -F json``
does, for a handful of made-up sensors.  Some sensors report Celsius,
some Fahrenheit, one reports no id; every tenth line is garbage so the
ingest loop's error path gets exercised too.

Usage:
    python decoder_simulator.py [--count N] [--interval S] -F json

Args:
    --count: Number of lines to emit, 0 for no limit (default 0).
    --interval: Seconds between lines (default 1.0).
    -F: Output format; only ``json`` is accepted.
"""

import argparse
import json
import random
import sys
import time

SENSORS = [
    {"model": "Acurite-Tower", "id": 7, "unit": "C", "humidity": True},
    {"model": "LaCrosse-TX141THBv2", "id": 120, "unit": "C", "humidity": True},
    {"model": "Ambientweather-F007TH", "id": 44, "unit": "F", "humidity": True},
    {"model": "Generic-Remote", "id": None, "unit": "C", "humidity": False},
]


def make_line(sensor: dict) -> str:
    """Return one JSON line with a random temperature for *sensor*."""
    obj = {
        "time": time.strftime("%Y-%m-%d %H:%M:%S"),
        "model": sensor["model"],
    }
    if sensor["id"] is not None:
        obj["id"] = sensor["id"]
    celsius = round(random.uniform(-10.0, 35.0), 1)
    if sensor["unit"] == "C":
        obj["temperature_C"] = celsius
    else:
        obj["temperature_F"] = round(celsius * 1.8 + 32, 1)
    if sensor["humidity"]:
        obj["humidity"] = random.randint(20, 95)
    return json.dumps(obj)


def run(count: int, interval: float) -> None:
    """Emit *count* lines (forever if 0), *interval* seconds apart."""
    n = 0
    try:
        while count == 0 or n < count:
            n += 1
            if n % 10 == 0:
                line = '{"model": "truncated'
            else:
                line = make_line(random.choice(SENSORS))
            print(line, flush=True)
            if interval > 0:
                time.sleep(interval)
    except (KeyboardInterrupt, BrokenPipeError):
        pass


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="fake rtl_433 JSON output")
    parser.add_argument("--count", type=int, default=0)
    parser.add_argument("--interval", type=float, default=1.0)
    parser.add_argument("-F", dest="format", required=True, choices=("json",))
    args = parser.parse_args()
    run(args.count, args.interval)
    sys.exit(0)
