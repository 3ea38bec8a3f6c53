#!/usr/bin/env python3
"""
Wrapper to run the attention tracker from a source checkout
without installing the package.
"""
import sys
import os

# Add src to path FIRST
sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'src'))

if __name__ == "__main__":
    from attention_engine.__main__ import main

    sys.exit(main(sys.argv[1:]))
