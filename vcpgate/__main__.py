from vcpgate.main import main

main()
