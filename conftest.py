import os
import sys

import matplotlib

# Add src to path so the tests run from a plain checkout
sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'src'))

matplotlib.use("Agg")
