from usportstats.cli import main

main()
