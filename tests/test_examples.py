#!/usr/bin/env python3
"""
Compile the bundled example programs and run them in the simulator.
"""

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))

from bfcil import compile_file
from bfcil.simulator import run_body

EXAMPLES = os.path.join(os.path.dirname(__file__), '..', 'examples')

CASES = [
    ("hello_world.bf", "", "Hello World!\n"),
    ("cat.bf", "copy me\n", "copy me\n"),
    ("add_digits.bf", "34", "7"),
]


def test_examples():
    for name, input_data, expected in CASES:
        result = compile_file(os.path.join(EXAMPLES, name))
        assert result.program_name == os.path.splitext(name)[0]
        assert run_body(result.body, input_data) == expected, name


if __name__ == '__main__':
    test_examples()
    print("✓ examples run as expected")
