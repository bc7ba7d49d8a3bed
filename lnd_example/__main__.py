from lnd_example.cli import main

main()
