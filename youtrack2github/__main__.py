from youtrack2github.cli import main

main()
