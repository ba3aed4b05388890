# Get the version number from the about directory.
import os

DIRECTORY = os.path.dirname(os.path.abspath(__file__))
ABOUT_DIR = os.path.join(DIRECTORY, "about")
VERSION_FILE = os.path.join(ABOUT_DIR, "version.txt")
if (os.path.exists(VERSION_FILE)):
    with open(VERSION_FILE) as f:
        __version__ = f.read().strip()
else:
    __version__ = "unknown"

from clusterbox.data import DataSet
from clusterbox.cluster import KMeans, TooFewPoints
from clusterbox.schema import TrainConfig, TrainResult
