"""
Transforms sub-package for unitfmt.

Contains the steps that turn one field's text into its converted text.

Design: Pipeline Pattern
- pipeline.py orchestrates the sequence of transforms for a single field.
- Individual transforms are in separate modules for testability:
  - numbers.py: Split a field into numeral and unit suffix, parse the numeral.
  - units.py: Resolve suffixes to (base, power), rescale between bases,
    emit SI / IEC suffixes.
  - rounding.py: The five rounding methods.
  - splitter.py: Split a line into fields and delimiter runs.

Every step is a pure function of its inputs and the frozen config, so
the same pipeline can be shared across all lines of a run.
"""
