from autover.cli.main import main

main()
