import sys

from chord_grid import ChordEvent, TimeSignature, build_measures, detect_key, normalize

events = [
    ChordEvent("A:min", 0.0, 2.0),
    ChordEvent("F:maj", 2.0, 3.0),
    ChordEvent("C:maj", 3.0, 4.0),
    ChordEvent("G:7", 4.0, 8.0),
]

sys.stdout.write(normalize("C#:min7") + "\n")  # "C#m7"
sys.stdout.write(detect_key(events) + "\n")  # "C"

# One slot per beat: "-" repeats the previous chord, "%" is a rest
for measure in build_measures(events, [0.0, 4.0, 8.0], TimeSignature(4, 4)):
    sys.stdout.write(measure.display_text + "\n")
