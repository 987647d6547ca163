"""Package entry point for ``python -m readalong_pagination``.

WHY: Users paginate a stored word-timestamp file from the terminal with
``python -m readalong_pagination words.json``. Python's ``-m`` flag
looks for ``__main__.py`` inside the package and executes it.

HOW: Delegates to the CLI's main() function.
"""

from readalong_pagination.cli import main

if __name__ == "__main__":
    main()
