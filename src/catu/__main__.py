from catu._cli import main

main()
