from mapkit_token.cli import main

if __name__ == "__main__":
    main()
