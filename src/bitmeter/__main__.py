from bitmeter.cli import main

main()
