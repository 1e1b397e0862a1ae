from ra.cli.app import main

main()
