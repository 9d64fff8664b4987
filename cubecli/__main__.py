from cubecli.cli import main

main()
