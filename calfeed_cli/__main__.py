from calfeed_cli import main

main()
