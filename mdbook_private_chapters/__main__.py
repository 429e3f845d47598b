from .preprocessor import main

main()
