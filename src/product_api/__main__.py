"""Run the Product API with ``python -m product_api``."""

from product_api.main import main

if __name__ == "__main__":
    main()
