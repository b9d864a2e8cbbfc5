from novendor.cli import main

main()
