"""Allow ``python -m edn_tsv``."""
from .cli import main

if __name__ == "__main__":
    main()
