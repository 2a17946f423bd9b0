from testsieve.cli import main

main()
