"""Entry point for `python -m token_watcher`."""


def main():
    from token_watcher.cli import main as run
    run()


if __name__ == "__main__":
    main()
