from fib_repl.cli import main

main()
