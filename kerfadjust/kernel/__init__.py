"""Standalone kernel: persistent settings and message channels."""

from .channel import *
from .kernel import *
from .settings import *
