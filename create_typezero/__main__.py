from create_typezero.cli import main

main()
