"""pagescrub_project package

The code base lives under *pagescrub_project.src.*; the pure scrubber logic is
in :pymod:`pagescrub_project.src.core` and the Qt widgets under
:pymod:`pagescrub_project.src.ui`.
"""

__version__ = "0.1.0"
