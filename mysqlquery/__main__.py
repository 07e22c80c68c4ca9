"""Entry point for mysqlquery."""


def main():
    """Start the GUI application. Qt's own arguments are honoured."""
    from mysqlquery.app import main as app_main
    app_main()


if __name__ == "__main__":
    main()
