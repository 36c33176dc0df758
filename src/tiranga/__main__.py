from tiranga.main import main

main()
