"""Allow ``python -m schemadoc``."""

from schemadoc.main import main

if __name__ == "__main__":
    main()
