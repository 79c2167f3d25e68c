from feedbackbot.cli import main

main()
