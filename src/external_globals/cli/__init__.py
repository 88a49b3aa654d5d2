"""
Command-line interface for ``external-globals``.

``__main__`` builds the argparse tree and dispatches through ``commands``,
which re-exports the ``convert`` and ``inspect`` handlers from ``handlers``.
"""
