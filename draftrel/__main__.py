from draftrel.cli.app import main

main()
