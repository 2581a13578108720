"""Menu model: scene stack, tweens, input handling, dialogs, keyboard, file explorer and top-level screens."""