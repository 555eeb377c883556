from hostsdoc.cli.app import main

main()
