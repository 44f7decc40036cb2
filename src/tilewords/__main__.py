from tilewords import main

main()
