# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

from setuptools import setup


setup(
  name='slog',
  version='0.1.0',
  description='slog is a structured logging library for Python 3, built around a deterministic logfmt codec.',
  python_requires='>=3.10',
  packages=['slog', 'utest'],
  scripts=['slog/bin/logfmt.py'],
  install_requires=[],
)
