#!/usr/bin/env python3
"""
Smoke-test runner for minijava: runs a few sample programs through the
lexer and parser, then the unit tests under tests/.
"""

import sys
import os
import unittest

# Add the project root to the Python path
project_root = os.path.abspath(os.path.dirname(__file__))
sys.path.insert(0, project_root)

SAMPLES = [
    ("declarations and arithmetic", """
    int x = 1 + 2 * 3;
    String name = "minijava";
    x = (x - 1) % 4;
    """, 0),
    ("class with methods", """
    public class Counter {
        int count;
        public void tick() { count++; }
        public static void main(String args) {
            while (count < 10) { tick(); }
            if (count == 10) System.out.println("done"); else count--;
        }
    }
    """, 0),
    ("error recovery", """
    int ;
    int y = 2
    z 5;
    w = ;
    """, 8),
]


def run_samples():
    """Parse each sample and check its diagnostic count."""
    from minijava.lexer import Lexer
    from minijava.parser import Parser

    print("minijava Front End Smoke Tests")
    print("=" * 60)

    for title, source, expected in SAMPLES:
        print(f"  Parsing {title}...")
        tokens = Lexer(source, f"<{title}>").tokenize()
        result = Parser(tokens).parse()

        if not result.ok:
            print(f"     FAILED: {result.fatal}")
            return False

        nodes = sum(1 for _ in result.root.walk())
        print(f"     {len(tokens)} tokens, {nodes} nodes, {len(result.diagnostics)} diagnostics")
        for message in result.diagnostics:
            print(f"        {message}")

        if len(result.diagnostics) != expected:
            print(f"     FAILED: expected {expected} diagnostics")
            return False

    print()
    return True


def run_all_tests():
    if not run_samples():
        return False

    suite = unittest.defaultTestLoader.discover(os.path.join(project_root, "tests"))
    return unittest.TextTestRunner(verbosity=1).run(suite).wasSuccessful()


if __name__ == "__main__":
    success = run_all_tests()
    sys.exit(0 if success else 1)
