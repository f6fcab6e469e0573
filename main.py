from stats_export.cmd.cli import main


if __name__ == "__main__":
    main()
