try:
    from tinychain.scmversion import __version__
except ImportError:
    # running from a source tree that was never installed; setuptools_scm writes scmversion.py at build time.
    __version__ = "unknown"


def main() -> None:
    print(__version__)
