# run.py
import sys
import os

# Lets the demo run from a source checkout without installing the package
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), 'src')))

from jalali_range_picker.main import main

if __name__ == '__main__':
    main()
