from chatwork_pomodoro.app import main

main()
