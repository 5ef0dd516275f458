"""Prometheus text exposition of the latest readings.

Renders three gauge families, always in this order and always with
their HELP/TYPE headers, even when no device reports a value:

    # HELP temperature_c The temperature in degrees celsius.
    # TYPE temperature_c gauge
    temperature_c{model="Acurite-Tower", id="7"} 21.5 1718000000000

Samples carry the ingest timestamp in milliseconds, or no timestamp
for a reading that was never stamped.  A device without
an instance id is labelled ``id="0"``.
"""

from rtlmon.reading import Reading
from rtlmon.units import reconcile

# (metric name, HELP text) in output order.
FAMILIES = (
    ("temperature_c", "The temperature in degrees celsius."),
    ("temperature_f", "The temperature in degrees fahrenheit."),
    ("humidity", "The humidity."),
)


def render(readings: list[Reading]) -> str:
    """Render *readings* as one exposition document."""
    samples: dict[str, list[str]] = {name: [] for name, _ in FAMILIES}

    for reading in readings:
        labels = format_labels(reading)
        celsius, fahrenheit = reconcile(
            reading.temperature_c, reading.temperature_f,
        )
        values = {
            "temperature_c": celsius,
            "temperature_f": fahrenheit,
            "humidity": reading.humidity,
        }
        for name, value in values.items():
            if value is None:
                continue
            line = "%s%s %.1f" % (name, labels, value)
            if reading.ingestion_time is not None:
                line += " %d" % reading.ingestion_time
            samples[name].append(line)

    blocks = []
    for name, help_text in FAMILIES:
        lines = [
            "# HELP %s %s" % (name, help_text),
            "# TYPE %s gauge" % name,
        ]
        lines.extend(samples[name])
        blocks.append("\n".join(lines))
    return "\n\n".join(blocks) + "\n"


def format_labels(reading: Reading) -> str:
    """Return the ``{model="...", id="..."}`` label set for *reading*."""
    device_id = reading.id if reading.id is not None else 0
    return '{model="%s", id="%d"}' % (escape_label(reading.model), device_id)


def escape_label(value: str) -> str:
    """Escape a label value for the text format."""
    return (
        value.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
    )
