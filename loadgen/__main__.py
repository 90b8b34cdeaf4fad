from loadgen.runner import main

main()
