from slide2048.cli import main


if __name__ == "__main__":
    main()
