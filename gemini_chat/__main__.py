from gemini_chat.gui.chat_window import main

main()
